"""
Declaration Data Structures

Frozen configuration structs describing what a form declares. They carry
no runtime state: nodes are built from them for every form instance, and
params definitions are generated from them (or from the rendered nodes).
"""
import enum

from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ConfigDict, Field, field_validator
from pyrsistent import pmap, pvector

from forma.data import DataModel
from forma.error import DefinitionError

from ._meta import config


OUTPUT_TYPES = {
    'string': str,
    'integer': int,
    'float': float,
    'decimal': Decimal,
    'bool': bool,
    'boolean': bool,
    'date': date,
    'datetime': datetime,
    'time': time,
    'array': list,
}


class SchemaPolicy(str, enum.Enum):
    DECLARED = 'declared'
    RENDERED = 'rendered'


class InputConfig(DataModel):
    type: str = 'text'
    attrs: Dict[str, Any] = Field(default_factory=dict)

    def __init__(self, type='text', attrs=None, **html_attrs):
        super().__init__(type=type, attrs={**(attrs or {}), **html_attrs})

    def get(self, key, default=None):
        return self.attrs.get(key, default)


class OutputConfig(DataModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    of: Optional[str] = None
    default: Any = None
    presence: Union[bool, Dict[str, Any]] = False
    inclusion: Any = None
    numericality: Any = None
    length: Optional[Dict[str, Any]] = None
    format: Any = None
    confirmation: Union[bool, Dict[str, Any]] = False
    if_: Any = Field(None, alias='if')
    unless: Any = None

    @field_validator('type', 'of')
    @classmethod
    def validate_type(cls, value):
        if value is not None and value not in OUTPUT_TYPES:
            raise DefinitionError(
                "F10.501",
                f"Unknown output type [{value}]. Supported: {', '.join(OUTPUT_TYPES)}"
            )
        return value

    @property
    def python_type(self):
        return OUTPUT_TYPES[self.type]

    @property
    def item_type(self):
        return OUTPUT_TYPES[self.of or 'string']


class LabelConfig(DataModel):
    text: Optional[str] = None
    display: bool = True
    attrs: Dict[str, Any] = Field(default_factory=dict)

    def __init__(self, text=None, display=True, attrs=None, **html_attrs):
        super().__init__(text=text, display=display, attrs={**(attrs or {}), **html_attrs})


class ElementDefinition(DataModel):
    name: Optional[str] = None
    input: InputConfig = Field(default_factory=InputConfig)
    output: Optional[OutputConfig] = None
    label: LabelConfig = Field(default_factory=LabelConfig)
    options: Tuple[Tuple[Any, Any], ...] = ()
    tags: Dict[str, Any] = Field(default_factory=dict)
    render_if: Any = None
    detached: bool = False
    disabled: bool = False
    readonly: bool = False
    node_class: Any = None

    @property
    def input_type(self):
        return str(self.input.type)


class Declarations(Mapping):
    ''' Immutable ordered mapping of name => definition. '''

    __slots__ = ('_order', '_items')

    def __init__(self, items=()):
        if isinstance(items, Mapping):
            items = items.items()

        entries = dict(items)
        self._order = pvector(entries.keys())
        self._items = pmap(entries)

    def __getitem__(self, name):
        return self._items[name]

    def __iter__(self):
        return iter(self._order)

    def __len__(self):
        return len(self._order)

    def __repr__(self):
        return f"Declarations({list(self._order)})"


class SubformDefinition(DataModel):
    name: Optional[str] = None
    declarations: Declarations = Field(default_factory=Declarations)
    default: Any = None
    render_if: Any = None
    node_class: Any = None


class CollectionDefinition(DataModel):
    name: Optional[str] = None
    subform: SubformDefinition = Field(default_factory=SubformDefinition)
    default: Any = None
    render_if: Any = None
    node_class: Any = None


DEFINITION_TYPES = (ElementDefinition, SubformDefinition, CollectionDefinition)


class FormMeta(DataModel):
    """
    Metadata for Form classes.

    Each Form subclass can define a Meta class with:
    - scope: prefix of the HTML names (optional)
    - schema_policy: "declared" or "rendered" (optional)
    - key: registers the form in the FormRegistry (optional)
    - name: model name used by the submit button (optional)
    """
    scope: Optional[str] = None
    schema_policy: SchemaPolicy = SchemaPolicy(config.DEFAULT_SCHEMA_POLICY)
    key: Optional[str] = None
    name: Optional[str] = None


def normalize_options(options) -> Tuple[Tuple[Any, Any], ...]:
    ''' Options are (value, label) pairs. A mapping is read as value => label,
        and a bare value is its own label. '''
    if options is None:
        return ()

    if isinstance(options, Mapping):
        return tuple(options.items())

    pairs: List[Tuple[Any, Any]] = []
    for option in options:
        if isinstance(option, (list, tuple)) and len(option) == 2:
            pairs.append((option[0], option[1]))
        else:
            pairs.append((option, option))

    return tuple(pairs)
