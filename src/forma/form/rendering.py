from markupsafe import Markup

from ._meta import config
from .collection import SubformsCollection
from .container import Container
from .element import Element
from .html import concat, tag
from .inputs import renderer_for


ERRORS_CSS_CLASS = config.ERRORS_CSS_CLASS
UTF8_ENFORCER_VALUE = config.UTF8_ENFORCER_VALUE
SUBMIT_INPUT_NAME = config.SUBMIT_INPUT_NAME
AUTHENTICITY_TOKEN_NAME = config.AUTHENTICITY_TOKEN_NAME
METHOD_OVERRIDE_NAME = config.METHOD_OVERRIDE_NAME
UNLABELED_INPUTS = ('radio', 'hidden')


class Rendering(object):
    ''' HTML rendering of a form and its node tree. Every step is a method
        so that form classes can override any part of the output. '''

    utf8_enforcer = False

    def render_elements(self, nodes=None):
        nodes = self.nodes if nodes is None else nodes
        return concat(*(self.render_node(node) for node in nodes if node.should_render()))

    def render_node(self, node):
        if isinstance(node, SubformsCollection):
            return self.render_collection(node)

        if isinstance(node, Container):
            return self.render_subform(node)

        if isinstance(node, Element):
            return self.render_element(node)

        raise TypeError(f"Cannot render node: {node!r}")

    def has_label(self, element):
        if not element.label_display or element.input_type in UNLABELED_INPUTS:
            return False

        return not (element.input_type == 'checkbox' and element.options)

    def render_element(self, element):
        return concat(
            self.render_label(element) if self.has_label(element) else None,
            self.render_input(element),
            self.render_errors(element),
        )

    def render_label(self, element):
        return tag('label', element.label_html_attributes(), element.label_text)

    def render_input(self, element):
        return renderer_for(element.input_type).render(element)

    def render_errors(self, element):
        if not element.errors_messages:
            return None

        return tag(
            'div',
            {'class': ERRORS_CSS_CLASS, 'id': f"{element.html_id}_errors"},
            ', '.join(element.errors_messages),
        )

    def render_subform(self, subform):
        return self.render_elements(subform.nodes)

    def render_script(self, source):
        return tag('script', {'type': 'text/javascript'}, Markup(source))

    def render_collection(self, collection):
        parts = [
            self.render_script(collection.remove_subform_js()),
            self.render_script(collection.add_subform_js()),
        ]

        for row in collection.rows:
            if row.should_render():
                parts.append(tag('div', {'id': row.html_id, 'class': row.html_class}, self.render_subform(row)))

        parts.append(self.render_subform_template(collection))
        return concat(*parts)

    def render_subform_template(self, collection):
        body = tag('div', {'class': f"new_{collection.name}"}, self.render_subform(collection.template))
        return tag('template', {'id': collection.template_html_id}, body)

    def form_html_attributes(self):
        attrs = {'method': self.html_method, 'action': self.html_action, 'accept-charset': 'UTF-8'}
        attrs.update((key, value) for key, value in self.html_options.items() if key not in ('method', 'action'))
        return attrs

    def render_form(self, body):
        return tag('form', self.form_html_attributes(), [
            self.render_utf8_input() if self.utf8_enforcer else None,
            self.render_authenticity_token() if self.helpers is not None else None,
            self.render_method_input() if self.http_method != 'get' else None,
            body,
        ])

    def render_utf8_input(self):
        return tag('input', {'name': 'utf8', 'type': 'hidden', 'value': UTF8_ENFORCER_VALUE, 'autocomplete': 'off'})

    def render_authenticity_token(self):
        return tag('input', {
            'name': AUTHENTICITY_TOKEN_NAME,
            'type': 'hidden',
            'value': self.helpers.form_authenticity_token(),
        })

    def render_method_input(self):
        return tag('input', {
            'name': METHOD_OVERRIDE_NAME,
            'type': 'hidden',
            'value': self.http_method,
            'autocomplete': 'off',
        })

    def render_submit(self, **html_attributes):
        return tag('input', {'name': SUBMIT_INPUT_NAME, 'type': 'submit', 'value': self.submit_value, **html_attributes})
