"""
Declaration DSL

Elements, subforms and collections are declared as class attributes:

    class OrderForm(Form):
        name = element('text', dict(type='string', presence=True))
        customer = subform(CustomerSubform)
        items = many(ItemSubform, default=[{}])

        class Meta:
            scope = "order"

The attributes are collected (in order) into an immutable `Declarations`
snapshot when the class is created, on top of a copy of the parent's
snapshot. Later changes go through `redefine` / `declare`, which build a
new snapshot with a `DeclarationBuilder`.
"""
from collections.abc import Mapping

from forma.error import DefinitionError

from ._meta import logger
from .datadef import (
    DEFINITION_TYPES,
    CollectionDefinition,
    Declarations,
    ElementDefinition,
    InputConfig,
    LabelConfig,
    OutputConfig,
    SubformDefinition,
    normalize_options,
)


def input_config(spec):
    if isinstance(spec, InputConfig):
        return spec

    if isinstance(spec, str):
        return InputConfig(spec)

    if isinstance(spec, Mapping):
        return InputConfig(**spec)

    raise DefinitionError("F10.502", f"Invalid input configuration: {spec!r}")


def output_config(spec):
    if spec is None or isinstance(spec, OutputConfig):
        return spec

    if isinstance(spec, str):
        return OutputConfig(type=spec)

    if isinstance(spec, Mapping):
        options = dict(spec)
        if 'if_' in options:
            options['if'] = options.pop('if_')
        return OutputConfig(**options)

    raise DefinitionError("F10.503", f"Invalid output configuration: {spec!r}")


def label_config(spec):
    if spec is None:
        return LabelConfig()

    if isinstance(spec, LabelConfig):
        return spec

    if spec is False:
        return LabelConfig(display=False)

    if isinstance(spec, str):
        return LabelConfig(text=spec)

    if isinstance(spec, Mapping):
        return LabelConfig(**spec)

    raise DefinitionError("F10.504", f"Invalid label configuration: {spec!r}")


def element(input='text', output=None, *, label=None, options=None, tags=None,
            render_if=None, detached=False, disabled=False, readonly=False, node_class=None):
    return ElementDefinition(
        input=input_config(input),
        output=output_config(output),
        label=label_config(label),
        options=normalize_options(options),
        tags=dict(tags or {}),
        render_if=render_if,
        detached=detached,
        disabled=disabled,
        readonly=readonly,
        node_class=node_class,
    )


def _source_declarations(source, elements):
    ''' A subform body is either a node class carrying `__declarations__`,
        a mapping of definitions, or inline keyword definitions. '''
    node_class = None
    builder = DeclarationBuilder()

    if isinstance(source, type):
        node_class = source
        builder = DeclarationBuilder(getattr(source, '__declarations__', None))
    elif isinstance(source, Mapping):
        builder = DeclarationBuilder(source)
    elif source is not None:
        raise DefinitionError("F10.505", f"Invalid subform source: {source!r}")

    for name, definition in elements.items():
        builder.declare(name, definition)

    return builder.build(), node_class


def subform(source=None, *, default=None, render_if=None, node_class=None, **elements):
    declarations, source_class = _source_declarations(source, elements)
    return SubformDefinition(
        declarations=declarations,
        default=default,
        render_if=render_if,
        node_class=node_class or source_class,
    )


def many(source=None, *, default=None, render_if=None, node_class=None, **elements):
    declarations, source_class = _source_declarations(source, elements)
    return CollectionDefinition(
        subform=SubformDefinition(declarations=declarations, node_class=source_class),
        default=default,
        render_if=render_if,
        node_class=node_class,
    )


class DeclarationBuilder(object):
    ''' Mutable collector of declarations, finalized with `build()`. '''

    def __init__(self, declarations=None):
        self._items = dict(declarations.items()) if declarations else {}

    def __contains__(self, name):
        return name in self._items

    def __getitem__(self, name):
        return self._items[name]

    def declare(self, name, definition):
        if not isinstance(definition, DEFINITION_TYPES):
            raise DefinitionError(
                "F10.506",
                f"Declaration [{name}] must be an element, a subform or a collection. Got: {definition!r}"
            )

        if isinstance(definition, CollectionDefinition):
            definition = definition.set(name=name, subform=definition.subform.set(name=name))
        else:
            definition = definition.set(name=name)

        self._items[name] = definition
        return self

    def element(self, name, *args, **kwargs):
        return self.declare(name, element(*args, **kwargs))

    def subform(self, name, *args, **kwargs):
        return self.declare(name, subform(*args, **kwargs))

    def many(self, name, *args, **kwargs):
        return self.declare(name, many(*args, **kwargs))

    def remove(self, name):
        self._items.pop(name)
        return self

    def redefine(self, name, configure=None, **changes):
        if name not in self._items:
            raise DefinitionError("F10.507", f"Cannot redefine undeclared name [{name}]")

        definition = self._items[name]

        if isinstance(definition, ElementDefinition):
            if configure is not None:
                raise DefinitionError("F10.508", f"Element [{name}] has no nested declarations to configure")
            self._items[name] = definition.set(**_element_changes(definition, changes))
            return self

        _check_changes(name, changes, ('default', 'render_if', 'node_class'))
        if isinstance(definition, CollectionDefinition):
            nested = definition.subform
            if configure is not None:
                nested = nested.set(declarations=_configured(nested.declarations, configure))
            self._items[name] = definition.set(subform=nested, **changes)
            return self

        if configure is not None:
            changes['declarations'] = _configured(definition.declarations, configure)
        self._items[name] = definition.set(**changes)
        return self

    def build(self):
        return Declarations(self._items)


ELEMENT_CHANGES = (
    'input', 'output', 'label', 'options', 'tags', 'render_if',
    'detached', 'disabled', 'readonly', 'node_class',
)


def _check_changes(name, changes, allowed):
    unknown = set(changes) - set(allowed)
    if unknown:
        raise DefinitionError(
            "F10.509",
            f"Unknown options for [{name}]: {', '.join(sorted(unknown))}"
        )


def _element_changes(definition, changes):
    _check_changes(definition.name, changes, ELEMENT_CHANGES)
    changes = dict(changes)
    if 'input' in changes:
        changes['input'] = input_config(changes['input'])
    if 'output' in changes:
        changes['output'] = output_config(changes['output'])
    if 'label' in changes:
        changes['label'] = label_config(changes['label'])
    if 'options' in changes:
        changes['options'] = normalize_options(changes['options'])
    if 'tags' in changes:
        changes['tags'] = {**definition.tags, **changes['tags']}
    return changes


def _configured(declarations, configure):
    builder = DeclarationBuilder(declarations)
    configure(builder)
    return builder.build()


class Composite(object):
    ''' Collects definition attributes of subclasses into `__declarations__`. '''

    __declarations__ = Declarations()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        builder = DeclarationBuilder(cls.__declarations__)
        for key, value in list(cls.__dict__.items()):
            if isinstance(value, DEFINITION_TYPES):
                builder.declare(key, value)
                delattr(cls, key)

        cls.__declarations__ = cls.__finalize_declarations__(builder.build())
        cls.__reset_declarations__()
        logger.debug('Declared %s: %s', cls.__name__, list(cls.__declarations__))

    @classmethod
    def __finalize_declarations__(cls, declarations):
        return declarations

    @classmethod
    def __reset_declarations__(cls):
        pass

    @classmethod
    def declare(cls, name, definition):
        builder = DeclarationBuilder(cls.__declarations__).declare(name, definition)
        cls.__declarations__ = cls.__finalize_declarations__(builder.build())
        cls.__reset_declarations__()
        return cls.__declarations__[name]

    @classmethod
    def redefine(cls, name, configure=None, **changes):
        builder = DeclarationBuilder(cls.__declarations__).redefine(name, configure, **changes)
        cls.__declarations__ = cls.__finalize_declarations__(builder.build())
        cls.__reset_declarations__()
        return cls.__declarations__[name]
