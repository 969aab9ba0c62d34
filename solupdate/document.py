from typing import Optional, Union, List, Dict

from .defdict import DefDict

Scalar = Union[str, int, float, bool]
FieldValue = Union[Scalar, List[Scalar]]


def check_boost(name: str, boost) -> Optional[float]:
    """ boost is None (not set) or a number, it goes into XML attribute as is """
    if boost is None:
        return None
    if isinstance(boost, bool) or not isinstance(boost, (int, float)):
        raise ValueError(f"{name} must be a number, got {boost!r}")
    return boost


class Document(DefDict):
    """
        Document for an add command

        Fields keep insertion order, a list value is a multi-valued field.
        Boosts are optional: None means "not set" and is never sent.
    """

    _d: Dict[str, FieldValue]

    def __init__(self, fields: Dict[str, FieldValue] = None, boost: Optional[float] = None,
                 field_boosts: Dict[str, Optional[float]] = None):

        super(Document, self).__init__()

        self.boost = check_boost('boost', boost)
        self.field_boosts = dict()

        for name, value in (fields or dict()).items():
            self.set_field(name, value)

        for name, field_boost in (field_boosts or dict()).items():
            self.set_field_boost(name, field_boost)

    @property
    def fields(self) -> Dict[str, FieldValue]:
        return dict(self._d)

    def set_field(self, name: str, value: Optional[FieldValue], boost: Optional[float] = None):
        """ set (overwrite) field value, None removes the field """
        if value is None:
            self.remove_field(name)
            return self

        check_boost(f'boost of field {name!r}', boost)

        if isinstance(value, (list, tuple)):
            value = list(value)

        self._d[name] = value
        self.set_field_boost(name, boost)
        return self

    def add_field(self, name: str, value: Scalar, boost: Optional[float] = None):
        """ add value to field, existing field becomes multi-valued """
        check_boost(f'boost of field {name!r}', boost)

        if name not in self._d:
            return self.set_field(name, value, boost)

        old = self._d[name]
        if isinstance(old, list):
            self._d[name] = old + [value]
        else:
            self._d[name] = [old, value]

        if boost is not None:
            self.set_field_boost(name, boost)
        return self

    def remove_field(self, name: str):
        self._d.pop(name, None)
        self.field_boosts.pop(name, None)
        return self

    def set_field_boost(self, name: str, boost: Optional[float]):
        if check_boost(f'boost of field {name!r}', boost) is None:
            self.field_boosts.pop(name, None)
        else:
            self.field_boosts[name] = boost
        return self

    def get_field_boost(self, name: str) -> Optional[float]:
        return self.field_boosts.get(name)

    def set_boost(self, boost: Optional[float]):
        self.boost = check_boost('boost', boost)
        return self

    def clear(self):
        self._d = dict()
        self.field_boosts = dict()
        self.boost = None
        return self

    def __setitem__(self, key, item):
        self.set_field(key, item)

    def __delitem__(self, key):
        self.remove_field(key)

    def __eq__(self, other):
        if not isinstance(other, Document):
            return NotImplemented
        return (self._d == other._d and self.boost == other.boost
                and self.field_boosts == other.field_boosts)

    def __repr__(self):
        return f"Document(boost={self.boost!r}) {self._d}"
