"""
Params Definition Generator

Walks the declarations of a form (policy "declared") or the rendered
nodes of a form instance (policy "rendered") and generates a pydantic
subclass of `Params`:

    - one lenient field per element with an output type,
    - `<name>_attributes` nested object per subform,
    - `<name>_attributes` nested list per collection.
"""
from datetime import date, datetime, time
from decimal import Decimal
from typing import Annotated, Any, List, NamedTuple, Optional, Tuple

from pydantic import BeforeValidator, Field, ValidationError, WrapValidator, create_model

from ._meta import config, logger
from .collection import SubformsCollection
from .container import Container
from .datadef import CollectionDefinition, SchemaPolicy, SubformDefinition
from .params import InvalidValue, Params, normalize_collection
from .validators import ParamsPatch, rules_for


NESTED_ATTRIBUTES_SUFFIX = config.NESTED_ATTRIBUTES_SUFFIX
SCALAR_TYPES = (int, float, Decimal, date, datetime, time)


class FieldSpec(NamedTuple):
    kind: str
    name: str
    definition: Any
    children: Tuple["FieldSpec", ...] = ()


def lenient(value, handler):
    try:
        return handler(value)
    except ValidationError:
        return InvalidValue(value)


def coerce_for(python_type):
    if python_type is str:
        def coerce(value):
            if isinstance(value, SCALAR_TYPES) and not isinstance(value, bool):
                return str(value)
            return value
        return coerce

    def coerce(value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    return coerce


def listify_for(item_type):
    def listify(value):
        if value is None or value == '':
            return None

        if isinstance(value, dict):
            value = normalize_collection(value)

        items = list(value) if isinstance(value, (list, tuple, set)) else [value]
        if item_type is not str:
            items = [item for item in items if not (isinstance(item, str) and not item.strip())]
        return items

    return listify


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def element_field(definition):
    output = definition.output
    if output.type == 'array':
        item = Annotated[output.item_type, BeforeValidator(coerce_for(output.item_type))]
        annotation = Annotated[Optional[List[item]], BeforeValidator(listify_for(output.item_type)), WrapValidator(lenient)]
    else:
        python_type = output.python_type
        annotation = Annotated[Optional[python_type], BeforeValidator(coerce_for(python_type)), WrapValidator(lenient)]

    return annotation, output.default


def attribute_for(name):
    ''' Attribute storing a declared name. Names pydantic cannot use as
        fields, or clashing with the Params API, are stored under an alias. '''
    if name.startswith('_') or hasattr(Params, name):
        return f"{name.lstrip('_')}_"

    return name


def camelize(name):
    return ''.join(part.capitalize() for part in str(name).split('_') if part)


def declared_specs(declarations):
    specs = []
    for definition in declarations.values():
        if isinstance(definition, CollectionDefinition):
            children = declared_specs(definition.subform.declarations)
            specs.append(FieldSpec('collection', definition.name, definition, tuple(children)))
        elif isinstance(definition, SubformDefinition):
            children = declared_specs(definition.declarations)
            specs.append(FieldSpec('subform', definition.name, definition, tuple(children)))
        elif definition.output is not None:
            specs.append(FieldSpec('element', definition.name, definition))

    return specs


def rendered_specs(nodes):
    specs = []
    for node in nodes:
        if not node.should_render():
            continue

        if isinstance(node, SubformsCollection):
            children = merged_row_specs(node)
            specs.append(FieldSpec('collection', node.name, node.definition, tuple(children)))
        elif isinstance(node, Container):
            children = rendered_specs(node.nodes)
            specs.append(FieldSpec('subform', node.name, node.definition, tuple(children)))
        elif node.definition.output is not None:
            specs.append(FieldSpec('element', node.name, node.definition))

    return specs


def merged_row_specs(collection):
    ''' Union of the fields rendered by the real rows, in declaration order.
        Without rows, the declared fields. The template never contributes. '''
    declarations = collection.definition.subform.declarations
    rows = [row for row in collection.rows if row.should_render()]
    if not rows:
        return declared_specs(declarations)

    merged = {}
    for row in rows:
        for spec in rendered_specs(row.nodes):
            merged.setdefault(spec.name, spec)

    order = list(declarations)
    return sorted(merged.values(), key=lambda spec: order.index(spec.name))


def build_params_class(class_name, specs, patch=None, form_class=None, module=None):
    fields = {}
    aliases = {}
    elements = []
    nested = []
    rules = {}

    def add_field(name, annotation, default):
        attr = attribute_for(name)
        if attr != name:
            aliases[name] = attr
            field = Field(default=default, alias=name, validate_default=default is not None)
        else:
            field = Field(default=default, validate_default=default is not None)
        fields[attr] = (annotation, field)

    names = {spec.name for spec in specs}
    for spec in specs:
        if spec.kind == 'element':
            annotation, default = element_field(spec.definition)
            add_field(spec.name, annotation, default)
            elements.append(spec.name)
            rules[spec.name] = tuple(rules_for(spec.definition.output))

            confirmation = f"{spec.name}_confirmation"
            if spec.definition.output.confirmation and confirmation not in names:
                add_field(confirmation, annotation, None)
            continue

        key = f"{spec.name}{NESTED_ATTRIBUTES_SUFFIX}"
        nested_patch = patch.children.get(spec.name) if patch is not None else None
        nested_class = build_params_class(
            f"{class_name[:-len('Params')]}{camelize(spec.name)}Params",
            spec.children, nested_patch, form_class, module
        )

        if spec.kind == 'collection':
            annotation = Annotated[
                Optional[List[nested_class]],
                BeforeValidator(normalize_collection),
                WrapValidator(lenient),
            ]
        else:
            annotation = Annotated[Optional[nested_class], BeforeValidator(blank_to_none), WrapValidator(lenient)]

        add_field(key, annotation, spec.definition.default)
        nested.append((key, spec.kind))

    params_class = create_model(class_name, __base__=Params, __module__=module or __name__, **fields)
    params_class.__form_class__ = form_class
    params_class.__aliases__ = aliases
    params_class.__elements__ = tuple(elements)
    params_class.__nested__ = tuple(nested)
    params_class.__rules__ = rules
    params_class.__patch_rules__ = tuple(patch.rules) if patch is not None else ()
    return params_class


def collect_patches(form_class):
    patch = ParamsPatch()
    for klass in reversed(form_class.__mro__):
        for func in klass.__dict__.get('__params_patches__', ()):
            func(patch)

    return patch


def generate_params_definition(form_class, nodes=None):
    ''' Params definition of a form class (from its declarations), or of
        a form instance (from its rendered `nodes`). '''
    if nodes is None:
        specs = declared_specs(form_class.__declarations__)
        class_name = f"{form_class.__name__}Params"
    else:
        specs = rendered_specs(nodes)
        class_name = f"{form_class.__name__}RenderedParams"

    params_class = build_params_class(
        class_name, specs, collect_patches(form_class), form_class, form_class.__module__
    )
    logger.debug('Generated params definition %s: %s', class_name, list(params_class.model_fields))
    return params_class


__all__ = (
    'SchemaPolicy',
    'FieldSpec',
    'declared_specs',
    'rendered_specs',
    'build_params_class',
    'generate_params_definition',
)
