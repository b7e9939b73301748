from .base import UNSET, Form, FormRegistry, is_persisted
from .collection import SubformsCollection
from .composition import NOT_FOUND, Composition, NotFound
from .datadef import (
    CollectionDefinition,
    Declarations,
    ElementDefinition,
    FormMeta,
    InputConfig,
    LabelConfig,
    OutputConfig,
    SchemaPolicy,
    SubformDefinition,
)
from .dsl import DeclarationBuilder, element, many, subform
from .element import Element
from .inputs import InputRenderer, InputRendererRegistry
from .model import ModelForm, ModelSubform
from .params import ErrorList, Params, normalize_collection, unflatten_params
from .schema import generate_params_definition
from .subform import Subform
from .validators import ParamsPatch

__all__ = (
    'NOT_FOUND',
    'UNSET',
    'CollectionDefinition',
    'Composition',
    'DeclarationBuilder',
    'Declarations',
    'Element',
    'ElementDefinition',
    'ErrorList',
    'Form',
    'FormMeta',
    'FormRegistry',
    'InputConfig',
    'InputRenderer',
    'InputRendererRegistry',
    'LabelConfig',
    'ModelForm',
    'ModelSubform',
    'NotFound',
    'OutputConfig',
    'Params',
    'ParamsPatch',
    'SchemaPolicy',
    'Subform',
    'SubformDefinition',
    'SubformsCollection',
    'element',
    'generate_params_definition',
    'is_persisted',
    'many',
    'normalize_collection',
    'subform',
    'unflatten_params',
)
