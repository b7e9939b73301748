"""
Subforms Collection

One row subform per item of the bound collection, indexed 0..n-1, plus
one template subform indexed with the NEW_RECORD placeholder. The
template is bound to a synthesized blank record and is only rendered
inside a <template> tag for client-side row creation.
"""
from collections.abc import Mapping

import jinja2

from forma.data import BlankModel

from ._meta import config
from .composition import Node
from .datadef import CollectionDefinition, ElementDefinition


NEW_RECORD_PLACEHOLDER = config.NEW_RECORD_PLACEHOLDER


class ScriptRenderer(object):
    def __init__(self, searchpath):
        self.template_loader = jinja2.FileSystemLoader(searchpath=searchpath)
        self.template_env = jinja2.Environment(loader=self.template_loader, keep_trailing_newline=True)

    def render(self, template_id, **data):
        template = self.template_env.get_template(template_id)
        return str(template.render(**data))


script_renderer = ScriptRenderer(config.TEMPLATE_DIR)


def template_record(definition):
    ''' Blank record for the template row: output defaults of the
        elements, None for nested nodes, then the subform default. '''
    values = {}
    for name, child in definition.declarations.items():
        if isinstance(child, ElementDefinition) and child.output is not None:
            values[name] = child.output.default
        else:
            values[name] = None

    values['persisted'] = False
    return BlankModel.create(definition.default if isinstance(definition.default, Mapping) else None, defaults=values)


class SubformsCollection(Node):
    def __init__(self, name, definition: CollectionDefinition, items=(), scope=None, owner=None, subform_class=None):
        self.name = name
        self.definition = definition
        self.scope = scope
        self.owner = owner
        self.tags = {}
        self.subform_class = subform_class
        self.subforms = [self.build_row(item, index) for index, item in enumerate(items or ())]
        self.subforms.append(self.build_template())

    def __repr__(self):
        return f"<{type(self).__name__} {self.name} rows={len(self.rows)}>"

    def __iter__(self):
        return iter(self.subforms)

    def __len__(self):
        return len(self.subforms)

    def __getitem__(self, index):
        return self.subforms[index]

    def row_scope(self, index):
        return f"{self.scope}[{index}]"

    def build_row(self, item, index):
        return self.subform_class(
            self.name, self.definition.subform,
            source=item, scope=self.row_scope(index), index=index, owner=self
        )

    def build_template(self):
        return self.subform_class(
            self.name, self.definition.subform,
            source=template_record(self.definition.subform),
            scope=self.row_scope(NEW_RECORD_PLACEHOLDER),
            index=NEW_RECORD_PLACEHOLDER, template=True, owner=self
        )

    @property
    def rows(self):
        return [subform for subform in self.subforms if not subform.tags['template']]

    @property
    def template(self):
        return self.subforms[-1]

    @property
    def template_html_id(self):
        return f"{self.name}_template"

    def add_subform_js(self):
        return script_renderer.render(
            'add_subform.js.j2',
            template_html_id=self.template_html_id,
            placeholder=NEW_RECORD_PLACEHOLDER,
        )

    def remove_subform_js(self):
        return script_renderer.render('remove_subform.js.j2', name=self.name)
