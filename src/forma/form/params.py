"""
Params Base

Generated params definitions (see `forma.form.schema`) are subclasses of
`Params`. Coercion never raises: a value that cannot be parsed is stored as
`None` and reported as "is invalid" when the params are validated, together
with the declared validation rules.
"""
import re

from collections.abc import Mapping
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, PrivateAttr

from forma.error import BadRequestError, InternalServerError
from forma.helper import humanize

from .composition import Composition


RX_PARAM_NAME = re.compile(r'^([^\[\]]+)((?:\[[^\[\]]*\])*)$')
RX_PARAM_KEY = re.compile(r'\[([^\[\]]*)\]')


class InvalidValue(object):
    __slots__ = ('raw',)

    def __init__(self, raw):
        self.raw = raw

    def __repr__(self):
        return f'InvalidValue({self.raw!r})'


class FieldError(NamedTuple):
    key: str
    message: str


class ErrorList(object):
    ''' Validation messages keyed by field path, in the order they were added. '''

    def __init__(self):
        self._entries = []

    def add(self, key, message):
        self._entries.append(FieldError(str(key), message))

    def merge(self, errors, prefix=''):
        for entry in errors:
            self.add(f'{prefix}{entry.key}', entry.message)

    def messages_for(self, key):
        key = str(key)
        return [entry.message for entry in self._entries if entry.key == key]

    def full_messages(self):
        return [f'{humanize(entry.key)} {entry.message}' for entry in self._entries]

    def to_dict(self):
        result = {}
        for entry in self._entries:
            result.setdefault(entry.key, []).append(entry.message)
        return result

    def any(self):
        return bool(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __bool__(self):
        return bool(self._entries)

    def __repr__(self):
        return f'ErrorList({self.to_dict()!r})'


class Params(BaseModel, Composition):
    model_config = ConfigDict(
        extra='ignore',
        populate_by_name=True,
        arbitrary_types_allowed=True,
        protected_namespaces=(),
    )

    # Filled in by the generator for each definition class
    __form_class__ = None
    __aliases__ = {}
    __elements__ = ()
    __nested__ = ()
    __rules__ = {}
    __patch_rules__ = ()

    _owner = PrivateAttr(default=None)
    _errors = PrivateAttr(default_factory=ErrorList)
    _invalid = PrivateAttr(default_factory=set)

    def model_post_init(self, context):
        for attr, value in list(self.__dict__.items()):
            if isinstance(value, InvalidValue):
                self._invalid.add(attr)
                self.__dict__[attr] = None
            elif isinstance(value, Params):
                value.bind_owner(self)
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, Params):
                        item.bind_owner(self)

    @classmethod
    def new(cls, data=None, owner=None, **kwargs):
        params = cls.model_validate({**(data or {}), **kwargs})
        if owner is not None:
            params.bind_owner(owner)
        return params

    @property
    def owner(self):
        return self._owner

    def bind_owner(self, owner):
        self._owner = owner
        return self

    @property
    def form_class(self):
        return type(self).__form_class__

    def lookup(self, name):
        ''' Value of a declared name. Names outside of the definition read as None. '''
        attr = self.__aliases__.get(name, name)
        if attr not in type(self).model_fields:
            return None

        return getattr(self, attr)

    def is_invalid_value(self, name):
        return self.__aliases__.get(name, name) in self._invalid

    @property
    def errors(self):
        return self._errors

    def run_validations(self):
        errors = ErrorList()

        for name, kind in self.__nested__:
            if self.is_invalid_value(name):
                errors.add(name, 'is invalid')
                continue

            value = self.lookup(name)
            if kind == 'collection':
                for index, row in enumerate(value or ()):
                    row.run_validations()
                    errors.merge(row.errors, prefix=f'{name}[{index}].')
            elif value is not None:
                value.run_validations()
                errors.merge(value.errors, prefix=f'{name}.')

        for name in self.__elements__:
            if self.is_invalid_value(name):
                errors.add(name, 'is invalid')

            for rule in self.__rules__.get(name, ()):
                for key, message in rule.check(self, name):
                    errors.add(key, message)

        for name, rule in self.__patch_rules__:
            for key, message in rule.check(self, name):
                errors.add(key, message)

        self._errors = errors
        return errors

    def valid(self):
        return not self.run_validations().any()

    def invalid(self):
        return not self.valid()

    def create_form(self, owner=None, **html_options):
        form_class = self.form_class
        if form_class is None:
            raise InternalServerError(
                "F30.501",
                f"Params definition [{type(self).__name__}] is not bound to a form class"
            )

        form = form_class(params=self, owner=owner if owner is not None else self.owner, **html_options)
        self.bind_owner(form)
        return form

    def to_dict(self):
        return self.model_dump(by_alias=True)


def _is_index(key):
    if isinstance(key, bool):
        return False

    return isinstance(key, int) or (isinstance(key, str) and key.isdigit())


def normalize_collection(value):
    ''' Index keyed mappings ({"1": {...}, "0": {...}}) become ordered lists:
        numeric keys ascending, then the other keys in insertion order.
        A mapping whose values are not mappings is a single row. '''
    if value is None or value == '':
        return None

    if isinstance(value, Mapping):
        items = list(value.items())
        if not all(isinstance(row, (Mapping, BaseModel)) for _, row in items):
            return [value]

        indexed = sorted(((int(key), row) for key, row in items if _is_index(key)), key=lambda item: item[0])
        others = [row for key, row in items if not _is_index(key)]
        return [row for _, row in indexed] + others

    if isinstance(value, (list, tuple)):
        return list(value)

    return value


def _param_keys(name):
    match = RX_PARAM_NAME.match(name)
    if match is None:
        raise BadRequestError("F30.401", f"Invalid parameter name: {name!r}")

    head, rest = match.groups()
    return [head] + RX_PARAM_KEY.findall(rest)


def _conflict(name):
    return BadRequestError("F30.402", f"Conflicting parameter structure at: {name!r}")


def unflatten_params(pairs):
    ''' Build the nested mapping a browser submission of bracketed
        names produces. `name[]` appends, otherwise the last value wins. '''
    if isinstance(pairs, Mapping):
        pairs = pairs.items()

    result = {}
    for name, value in pairs:
        keys = _param_keys(name)
        target = result
        for position, key in enumerate(keys):
            if key == '':
                raise BadRequestError("F30.403", f"Unsupported array position in parameter: {name!r}")

            if position == len(keys) - 1:
                if isinstance(target.get(key), (dict, list)):
                    raise _conflict(name)
                target[key] = value
                break

            following = keys[position + 1]
            if following == '':
                if position + 1 != len(keys) - 1:
                    raise BadRequestError("F30.403", f"Unsupported array position in parameter: {name!r}")

                current = target.setdefault(key, [])
                if not isinstance(current, list):
                    raise _conflict(name)
                current.append(value)
                break

            current = target.setdefault(key, {})
            if not isinstance(current, dict):
                raise _conflict(name)
            target = current

    return result
