"""
Form Base

Forms are declared by subclassing `Form` with element, subform and
collection definitions as class attributes:

    class InfoForm(Form):
        birthdate = element(dict(type='text', class_='form-control'), 'date')
        biography = element('checkbox', 'bool')

        class Meta:
            scope = "info"
            key = "info-form"

Each instance builds a node tree bound to the given params (first) or
model, and renders it with `render()`.
"""
from forma.error import InternalServerError
from forma.helper import ClassRegistry, hybridmethod

from ._meta import logger
from .container import Container
from .datadef import FormMeta, SchemaPolicy
from .dsl import Composite
from .params import Params
from .rendering import Rendering
from .schema import generate_params_definition
from .subform import Subform


class UnsetType(object):
    def __repr__(self):
        return 'UNSET'


UNSET = UnsetType()


def is_persisted(record):
    if record is None:
        return False

    persisted = getattr(record, 'persisted', False)
    return bool(persisted() if callable(persisted) else persisted)


class Form(Rendering, Container, Composite):
    __meta__ = FormMeta()
    __params_definition__ = None

    class Meta:
        pass

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        meta = {
            key: value for key, value in cls.__dict__.get('Meta', object).__dict__.items()
            if not key.startswith('_')
        }
        inherited = cls.__meta__.model_dump(exclude={'key'})
        try:
            cls.__meta__ = FormMeta(**{**inherited, **meta})
        except ValueError as e:
            raise InternalServerError("F10.511", f"Invalid Meta of form [{cls.__name__}]: {e}") from e

        if 'key' in meta:
            FormRegistry.register(cls.__meta__.key)(cls)

    @classmethod
    def __reset_declarations__(cls):
        cls.__params_definition__ = None

    @classmethod
    def subform_class(cls):
        return Subform

    def __init__(self, model=None, scope=UNSET, params=None, owner=None, helpers=None, **html_options):
        self.namespaced_model = model
        self.model = model[-1] if isinstance(model, (list, tuple)) else model
        self.scope = self.__meta__.scope if scope is UNSET else scope
        self.bound_params = params
        self.owner = owner
        self.helpers = helpers
        self.html_options = html_options
        self.source = params if params is not None else self.model
        self._params_definition = None

        if isinstance(params, Params) and params.owner is None:
            params.bind_owner(self)

        self.build_nodes(self.__declarations__, self.source)

    def __repr__(self):
        return f"<{type(self).__name__} scope={self.scope!r}>"

    @classmethod
    def params(cls, func):
        ''' Register a params patch: `func(patch)` adds rules to the params definition. '''
        if '__params_patches__' not in cls.__dict__:
            cls.__params_patches__ = []

        cls.__params_patches__.append(func)
        cls.__params_definition__ = None
        return func

    @hybridmethod
    def params_definition(cls):
        definition = cls.__dict__.get('__params_definition__')
        if definition is None:
            definition = generate_params_definition(cls)
            cls.__params_definition__ = definition

        return definition

    @params_definition.instancemethod
    def params_definition(self):
        if self._params_definition is None:
            if self.__meta__.schema_policy == SchemaPolicy.RENDERED:
                self._params_definition = generate_params_definition(type(self), self.nodes)
            else:
                self._params_definition = type(self).params_definition()

        return self._params_definition

    @property
    def errors(self):
        return getattr(self.source, 'errors', None)

    @property
    def model_name(self):
        if self.__meta__.name:
            return self.__meta__.name

        if self.model is None:
            return ''

        name = getattr(self.model, 'model_name', None)
        return str(name) if name is not None else type(self.model).__name__

    @property
    def action_name(self):
        return 'update' if is_persisted(self.model) else 'create'

    @property
    def http_method(self):
        method = self.html_options.get('method')
        if method:
            return str(method).lower()

        return 'patch' if is_persisted(self.model) else 'post'

    @property
    def html_method(self):
        return 'get' if self.http_method == 'get' else 'post'

    @property
    def html_action(self):
        action = self.html_options.get('action')
        if action:
            return action

        if self.helpers is not None and self.model is not None:
            return self.helpers.polymorphic_path(self.namespaced_model)

        return '/'

    @property
    def submit_value(self):
        return f"{self.action_name.capitalize()} {self.model_name}".strip()

    def view_template(self):
        return self.render_form(self.render_elements() + self.render_submit())

    def render(self):
        logger.debug('Rendering %r', self)
        return str(self.view_template())

    def __html__(self):
        return self.view_template()


FormRegistry = ClassRegistry(Form)
