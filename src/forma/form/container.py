from collections.abc import Mapping

from ._meta import config
from .collection import SubformsCollection
from .composition import Node
from .datadef import CollectionDefinition, SubformDefinition
from .element import Element
from .params import Params, normalize_collection


NESTED_ATTRIBUTES_SUFFIX = config.NESTED_ATTRIBUTES_SUFFIX


class Container(Node):
    ''' A node owning child nodes built from declarations. '''

    __element_class__ = Element
    __collection_class__ = SubformsCollection

    scope = None
    nodes = ()

    @classmethod
    def subform_class(cls):
        raise NotImplementedError

    def element_tags(self):
        return {}

    def __iter__(self):
        return iter(self.nodes)

    def __getitem__(self, name):
        for node in self.nodes:
            if node.name == name:
                return node

        raise KeyError(name)

    def child_scope(self, name):
        key = f"{name}{NESTED_ATTRIBUTES_SUFFIX}"
        return f"{self.scope}[{key}]" if self.scope else key

    def nested_value(self, source, name):
        ''' Params carry nested values under `<name>_attributes`, models under `<name>`. '''
        if source is None:
            return None

        key = f"{name}{NESTED_ATTRIBUTES_SUFFIX}"
        if isinstance(source, Params):
            return source.lookup(key)

        if isinstance(source, Mapping):
            return source[key] if key in source else source.get(name)

        return getattr(source, name)

    def build_nodes(self, declarations, source):
        self.nodes = [self.build_node(definition, source) for definition in declarations.values()]
        return self.nodes

    def build_node(self, definition, source):
        if isinstance(definition, CollectionDefinition):
            return self.build_collection(definition, source)

        if isinstance(definition, SubformDefinition):
            return self.build_subform(definition, source)

        return self.build_element(definition, source)

    def build_element(self, definition, source):
        node_class = definition.node_class or self.__element_class__
        element = node_class(definition.name, definition, source, scope=self.scope, owner=self)
        element.tags.update(self.element_tags())
        return element

    def build_subform(self, definition, source):
        node_class = definition.node_class or self.subform_class()
        return node_class(
            definition.name, definition,
            source=self.nested_value(source, definition.name),
            scope=self.child_scope(definition.name),
            owner=self,
        )

    def build_collection(self, definition, source):
        items = normalize_collection(self.nested_value(source, definition.name))
        node_class = definition.node_class or self.__collection_class__
        return node_class(
            definition.name, definition,
            items=list(items or ()),
            scope=self.child_scope(definition.name),
            owner=self,
            subform_class=definition.subform.node_class or self.subform_class(),
        )
