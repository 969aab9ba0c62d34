from typing import Optional, List, Dict, Any
from urllib.parse import urlencode

import requests
from pydantic import BaseModel, Field


METHOD_GET = 'GET'
METHOD_POST = 'POST'


class Request(BaseModel):
    """ outgoing request descriptor, built here and sent by someone else """

    method: str = METHOD_GET
    handler: str = ''
    params: Dict[str, List[str]] = Field(default_factory=dict)
    headers: List[str] = Field(default_factory=list)
    raw_data: Optional[str] = None

    @staticmethod
    def param_value(value: Any) -> str:
        if isinstance(value, bool):
            return 'true' if value else 'false'
        return str(value)

    def add_param(self, name: str, value: Any):
        if value is None:
            return self

        values = value if isinstance(value, (list, tuple)) else [value]
        self.params.setdefault(name, list()).extend(
            self.param_value(v) for v in values if v is not None)
        return self

    def add_params(self, params: Dict[str, Any]):
        for name, value in params.items():
            self.add_param(name, value)
        return self

    def add_header(self, header: str):
        self.headers.append(header)
        return self

    def get_header_dict(self) -> Dict[str, str]:
        headers = dict()
        for header in self.headers:
            name, value = header.split(':', 1)
            headers[name.strip()] = value.strip()
        return headers

    def get_query_string(self) -> str:
        return urlencode([(name, v) for name, values in self.params.items() for v in values])

    def get_uri(self) -> str:
        qs = self.get_query_string()
        if qs:
            return f'{self.handler}?{qs}'
        return self.handler

    def prepare(self, base_url: str) -> requests.PreparedRequest:
        """ make (not send) requests.PreparedRequest for base_url like http://localhost:8983/solr/core/ """
        url = base_url.rstrip('/') + '/' + self.handler.lstrip('/')
        data = self.raw_data.encode('utf-8') if self.raw_data is not None else None
        return requests.Request(method=self.method, url=url,
                                params=[(name, v) for name, values in self.params.items() for v in values],
                                headers=self.get_header_dict(), data=data).prepare()


class RequestBuilder():
    """ common part of every request: handler, params, response writer """

    def build(self, query) -> Request:
        request = Request(handler=query.handler)
        request.add_params(query.params)
        request.add_param('wt', query.response_writer)
        request.add_param('omitHeader', query.omit_header)
        return request
