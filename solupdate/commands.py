from typing import Optional, Union, List, Dict, Literal
from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, TypeAdapter, field_validator

from .document import Document


Number = Union[StrictInt, StrictFloat]
Scalar = Union[StrictStr, StrictBool, StrictInt, StrictFloat]


class DocumentData(BaseModel):
    """ document as it comes from JSON/YAML: {"fields": {..}, "boost": 2.0, "field_boosts": {..}} """
    model_config = ConfigDict(extra='forbid')

    fields: Dict[StrictStr, Optional[Union[Scalar, List[Optional[Scalar]]]]]
    boost: Optional[Number] = None
    field_boosts: Dict[StrictStr, Optional[Number]] = Field(default_factory=dict)

    def make_document(self) -> Document:
        return Document(fields=self.fields, boost=self.boost, field_boosts=self.field_boosts)


class BaseCommand(BaseModel):
    """ update commands are immutable once built """
    model_config = ConfigDict(frozen=True, extra='forbid')

    type: str


class Add(BaseCommand):
    model_config = ConfigDict(frozen=True, extra='forbid', arbitrary_types_allowed=True)

    type: Literal['add'] = 'add'
    overwrite: Optional[StrictBool] = None
    commit_within: Optional[StrictInt] = Field(default=None, description='milliseconds')
    documents: List[Document] = Field(default_factory=list)

    @field_validator('documents', mode='before')
    @classmethod
    def make_documents(cls, documents):
        if not isinstance(documents, (list, tuple)):
            return documents

        result = list()
        for doc in documents:
            if isinstance(doc, dict):
                doc = DocumentData.model_validate(doc).make_document()
            result.append(doc)
        return result


class Delete(BaseCommand):
    type: Literal['delete'] = 'delete'
    ids: List[StrictStr] = Field(default_factory=list)
    queries: List[StrictStr] = Field(default_factory=list)


class Optimize(BaseCommand):
    type: Literal['optimize'] = 'optimize'
    wait_flush: Optional[StrictBool] = None
    wait_searcher: Optional[StrictBool] = None
    max_segments: Optional[StrictInt] = None


class Commit(BaseCommand):
    type: Literal['commit'] = 'commit'
    wait_flush: Optional[StrictBool] = None
    wait_searcher: Optional[StrictBool] = None
    expunge_deletes: Optional[StrictBool] = None


class Rollback(BaseCommand):
    type: Literal['rollback'] = 'rollback'


Command = Annotated[Union[Add, Delete, Optimize, Commit, Rollback], Field(discriminator='type')]

command_adapter = TypeAdapter(Command)


def parse_command(data: dict) -> BaseCommand:
    """ validate mapping like {'type': 'commit', 'wait_searcher': True} into command """
    return command_adapter.validate_python(data)
