"""
Model bound forms

`ModelForm` binds to ORM-style records (attribute readers, `persisted`,
optional `model_name.param_key`). Every nested record gets an `id` hidden
element, and every collection row a detached `_destroy` flag, so that the
submitted params can update and delete nested records.
"""
from forma.helper import camel_to_lower

from .base import UNSET, Form, is_persisted
from .datadef import CollectionDefinition, SubformDefinition
from .dsl import DeclarationBuilder, element
from .params import Params
from .subform import Subform


PRIMARY_KEY = 'id'
DESTROY_FLAG = '_destroy'


def param_key(record):
    model_name = getattr(record, 'model_name', None)
    key = getattr(model_name, 'param_key', None)
    if key:
        return str(key)

    return camel_to_lower(type(record).__name__)


def record_value(source, name):
    if source is None:
        return None

    if isinstance(source, Params):
        return source.lookup(name)

    return getattr(source, name, None)


def stored_or_submitted(name):
    ''' Render for persisted records, or for params carrying a value for `name`. '''
    def predicate(node):
        if isinstance(node.source, Params):
            return node.source.lookup(name) is not None

        return is_persisted(node.source)

    predicate.__name__ = f'stored_or_submitted_{name.lstrip("_")}'
    return predicate


def primary_key_element():
    return element(
        dict(type='hidden', autocomplete='off'), 'integer',
        render_if=stored_or_submitted(PRIMARY_KEY),
    )


def destroy_element():
    return element(
        dict(type='hidden', autocomplete='off', value='0'), 'bool',
        render_if=stored_or_submitted(DESTROY_FLAG), detached=True,
    )


def with_record_keys(declarations):
    builder = DeclarationBuilder(declarations)
    for name, definition in declarations.items():
        if isinstance(definition, CollectionDefinition):
            nested = nested_record_keys(definition.subform.declarations, destroy=True)
            builder.declare(name, definition.set(subform=definition.subform.set(declarations=nested)))
        elif isinstance(definition, SubformDefinition):
            builder.declare(name, definition.set(declarations=nested_record_keys(definition.declarations)))

    return builder.build()


def nested_record_keys(declarations, destroy=False):
    builder = DeclarationBuilder(with_record_keys(declarations))
    if PRIMARY_KEY not in builder:
        builder.declare(PRIMARY_KEY, primary_key_element())
    if destroy and DESTROY_FLAG not in builder:
        builder.declare(DESTROY_FLAG, destroy_element())
    return builder.build()


class ModelSubform(Subform):
    @classmethod
    def subform_class(cls):
        return ModelSubform

    @property
    def html_class(self):
        if record_value(self.source, PRIMARY_KEY) is None:
            return f"new_{self.name}"

        return super().html_class


class ModelForm(Form):
    utf8_enforcer = True

    @classmethod
    def subform_class(cls):
        return ModelSubform

    @classmethod
    def __finalize_declarations__(cls, declarations):
        return with_record_keys(declarations)

    def __init__(self, model=None, scope=UNSET, params=None, **kwargs):
        record = model[-1] if isinstance(model, (list, tuple)) else model
        if scope is UNSET:
            scope = self.__meta__.scope
            if scope is None and record is not None:
                scope = param_key(record)

        super().__init__(model, scope=scope, params=params, **kwargs)

    @property
    def action_name(self):
        if self.model is None:
            return 'search'

        return super().action_name

    @property
    def http_method(self):
        if self.model is None:
            return str(self.html_options.get('method') or 'get').lower()

        return 'patch' if is_persisted(self.model) else 'post'
