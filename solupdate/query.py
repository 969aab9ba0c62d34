import logging
from typing import Optional, Union, List, Dict, Iterable

from pydantic import ValidationError

from .commands import BaseCommand, Add, Delete, Optimize, Commit, Rollback, parse_command
from .config import Config
from .document import Document
from .exception import LoadException

log = logging.getLogger(__name__)


class UpdateQuery():
    """
        Update query: ordered list of commands for the update handler

        Commands are executed by the server in the order they were added.
        All add_* helpers return the query itself, so calls can be chained:

        >>> query = UpdateQuery()
        >>> query.add_document(doc).add_commit(wait_searcher=True)
    """

    def __init__(self, config: Config = None, handler: str = None,
                 response_writer: str = None, omit_header: bool = None, params: dict = None):

        self.config = config if config is not None else Config(environ={})

        self.handler = handler or self.config['handler']
        self.response_writer = response_writer or self.config['response_writer']
        self.omit_header = self.config['omit_header'] if omit_header is None else omit_header
        self.params = dict(self.config.get('params') or dict())
        self.params.update(params or dict())

        self._commands: Dict[Union[str, int], BaseCommand] = dict()
        self._next_key = 0

    @property
    def commands(self) -> List[BaseCommand]:
        return list(self._commands.values())

    def add(self, key: Optional[str], command: BaseCommand):
        """ add command, optionally under a key (used for remove) """
        if key is None:
            key = self._next_key
            self._next_key += 1
        self._commands[key] = command
        return self

    def remove(self, command: Union[str, int, BaseCommand]):
        """ remove command by key or by instance """
        if isinstance(command, BaseCommand):
            for key, cmd in self._commands.items():
                if cmd is command:
                    del self._commands[key]
                    break
        else:
            self._commands.pop(command, None)
        return self

    def create_document(self, fields: dict = None, boost: Optional[float] = None,
                        field_boosts: dict = None) -> Document:
        return Document(fields=fields, boost=boost, field_boosts=field_boosts)

    def add_document(self, document: Document, overwrite: Optional[bool] = None,
                     commit_within: Optional[int] = None):
        return self.add_documents([document], overwrite=overwrite, commit_within=commit_within)

    def add_documents(self, documents: Iterable[Document], overwrite: Optional[bool] = None,
                      commit_within: Optional[int] = None):
        return self.add(None, Add(documents=list(documents), overwrite=overwrite,
                                  commit_within=commit_within))

    def add_delete_by_id(self, id: str):
        return self.add_delete_by_ids([id])

    def add_delete_by_ids(self, ids: Iterable[str]):
        return self.add(None, Delete(ids=list(ids)))

    def add_delete_query(self, query: str):
        return self.add_delete_queries([query])

    def add_delete_queries(self, queries: Iterable[str]):
        return self.add(None, Delete(queries=list(queries)))

    def add_commit(self, wait_flush: Optional[bool] = None, wait_searcher: Optional[bool] = None,
                   expunge_deletes: Optional[bool] = None):
        return self.add(None, Commit(wait_flush=wait_flush, wait_searcher=wait_searcher,
                                     expunge_deletes=expunge_deletes))

    def add_optimize(self, wait_flush: Optional[bool] = None, wait_searcher: Optional[bool] = None,
                     max_segments: Optional[int] = None):
        return self.add(None, Optimize(wait_flush=wait_flush, wait_searcher=wait_searcher,
                                       max_segments=max_segments))

    def add_rollback(self):
        return self.add(None, Rollback())

    @classmethod
    def from_dict(cls, data: dict, config: Config = None) -> "UpdateQuery":
        """
            build query from mapping:
            {'handler': 'update', 'commands': [{'type': 'commit'}, ...]}
        """
        if not isinstance(data, dict):
            raise LoadException(f"Update description must be a mapping, got {type(data).__name__}")

        commands = data.get('commands')
        if not isinstance(commands, list):
            raise LoadException("Update description needs 'commands' list")

        query = cls(config=config, handler=data.get('handler'),
                    response_writer=data.get('response_writer'),
                    omit_header=data.get('omit_header'),
                    params=data.get('params'))

        for n, cmd in enumerate(commands):
            try:
                query.add(None, parse_command(cmd))
            except ValidationError as e:
                raise LoadException(f"Bad command #{n}: {e}")

        log.debug(f"loaded {len(query)} commands")
        return query

    def __len__(self):
        return len(self._commands)

    def __iter__(self):
        yield from self._commands.values()

    def __repr__(self):
        return f"UpdateQuery({self.handler!r}) {' '.join(c.type for c in self)}"
