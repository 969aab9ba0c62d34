import logging
from typing import Any, Iterable
from xml.sax.saxutils import escape as xml_escape

from .commands import BaseCommand, Add, Delete, Optimize, Commit
from .config import Config
from .document import check_boost
from .exception import UnsupportedCommandKind
from .request import Request, RequestBuilder, METHOD_POST

log = logging.getLogger(__name__)

CONTENT_TYPE = 'Content-Type: text/xml; charset=utf-8'


def format_value(value: Any) -> str:
    """ canonical text: true/false for booleans, 2.0 -> '2' """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def attrib(name: str, value: Any) -> str:
    """ ' name="value"' or empty string if value is not set (None) """
    if value is None:
        return ''
    return f' {name}="{format_value(value)}"'


def escape(text: str) -> str:
    # & < > only, quotes stay as is in element text
    return xml_escape(text)


class UpdateRequestBuilder(RequestBuilder):
    """
        Build update request: POST with XML body

        <update><add>..</add><delete>..</delete><commit/></update>

        Field names are put into the name attribute unescaped unless
        escape_field_names is set; some servers and tests rely on the
        exact legacy output.
    """

    def __init__(self, escape_field_names: bool = None, config: Config = None):
        if escape_field_names is None:
            escape_field_names = config['escape_field_names'] if config is not None else False
        self.escape_field_names = escape_field_names

    def build(self, query) -> Request:
        request = super(UpdateRequestBuilder, self).build(query)
        request.method = METHOD_POST
        request.add_header(CONTENT_TYPE)
        request.raw_data = self.serialize(query.commands)
        log.debug(f"update request {request.get_uri()!r}: {len(query.commands)} commands, {len(request.raw_data)} bytes")
        return request

    def serialize(self, commands: Iterable[BaseCommand]) -> str:
        xml = '<update>'
        for command in commands:
            kind = getattr(command, 'type', None)
            if kind == 'add':
                xml += self.build_add_xml(command)
            elif kind == 'delete':
                xml += self.build_delete_xml(command)
            elif kind == 'optimize':
                xml += self.build_optimize_xml(command)
            elif kind == 'commit':
                xml += self.build_commit_xml(command)
            elif kind == 'rollback':
                xml += self.build_rollback_xml()
            else:
                raise UnsupportedCommandKind(kind)
        xml += '</update>'
        return xml

    def build_add_xml(self, command: Add) -> str:
        xml = '<add'
        xml += attrib('overwrite', command.overwrite)
        xml += attrib('commitWithin', command.commit_within)
        xml += '>'

        for doc in command.documents:
            xml += '<doc'
            xml += attrib('boost', check_boost('boost', doc.boost))
            xml += '>'

            for name, value in doc.items():
                boost = check_boost(f'boost of field {name!r}', doc.get_field_boost(name))
                if isinstance(value, list):
                    for multival in value:
                        if multival is None:
                            continue
                        xml += self.build_field_xml(name, boost, multival)
                else:
                    xml += self.build_field_xml(name, boost, value)

            xml += '</doc>'

        xml += '</add>'
        return xml

    def build_field_xml(self, name: str, boost, value) -> str:
        if self.escape_field_names:
            name = escape(str(name)).replace('"', '&quot;')

        xml = f'<field name="{name}"'
        xml += attrib('boost', boost)
        xml += '>' + escape(format_value(value))
        xml += '</field>'
        return xml

    def build_delete_xml(self, command: Delete) -> str:
        xml = '<delete>'
        for id in command.ids:
            xml += f'<id>{escape(id)}</id>'
        for query in command.queries:
            xml += f'<query>{escape(query)}</query>'
        xml += '</delete>'
        return xml

    def build_optimize_xml(self, command: Optimize) -> str:
        xml = '<optimize'
        xml += attrib('waitFlush', command.wait_flush)
        xml += attrib('waitSearcher', command.wait_searcher)
        xml += attrib('maxSegments', command.max_segments)
        xml += '/>'
        return xml

    def build_commit_xml(self, command: Commit) -> str:
        xml = '<commit'
        xml += attrib('waitFlush', command.wait_flush)
        xml += attrib('waitSearcher', command.wait_searcher)
        xml += attrib('expungeDeletes', command.expunge_deletes)
        xml += '/>'
        return xml

    def build_rollback_xml(self) -> str:
        return '<rollback/>'
