__version__='0.1'

from .builder import UpdateRequestBuilder, attrib, escape
from .commands import Add, Delete, Optimize, Commit, Rollback, Command, parse_command
from .config import Config
from .document import Document
from .exception import SolupdateException, UnsupportedCommandKind, ConfigException, LoadException
from .query import UpdateQuery
from .request import Request, RequestBuilder


def build(query: UpdateQuery, config: Config = None) -> Request:
    """ build POST update request for query """
    return UpdateRequestBuilder(config=config if config is not None else query.config).build(query)


def serialize(commands) -> str:
    """ raw XML body for list of commands """
    return UpdateRequestBuilder().serialize(commands)
