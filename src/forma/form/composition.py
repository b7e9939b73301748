"""
Owner Chain

Every node keeps a reference to the node that built it (`owner`). A node
can look up a capability (any callable attribute) on itself and then on
its owners, strictly upward. The chain ends after the first owner that is
not a composition node, which is usually the host object handed to the
top level form.
"""
import itertools

from forma.error import OwnerChainError

from ._meta import logger


class NotFound(object):
    ''' Result of a capability lookup that found nothing. Falsy. '''

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return 'NOT_FOUND'


NOT_FOUND = NotFound()


class Composition(object):
    owner = None

    def owners_chain(self):
        node = self
        while isinstance(node, Composition):
            node = node.owner
            if node is None:
                return

            yield node

    def resolve(self, name):
        for node in itertools.chain((self,), self.owners_chain()):
            handler = getattr(node, name, None)
            if callable(handler):
                return handler

        return NOT_FOUND

    def delegate(self, name, *args, **kwargs):
        handler = self.resolve(name)
        if handler is NOT_FOUND:
            chain = [type(node).__name__ for node in itertools.chain((self,), self.owners_chain())]
            logger.debug('Unresolved capability [%s] on owner chain: %s', name, chain)
            raise OwnerChainError(
                "F20.404",
                f"No owner of [{type(self).__name__}] responds to [{name}]",
                {"name": name, "chain": chain}
            )

        return handler(*args, **kwargs)


class Node(Composition):
    ''' A built node of a form, conditionally rendered by its `render_if`. '''

    definition = None

    def should_render(self):
        condition = getattr(self.definition, 'render_if', None)
        if condition is None:
            return True

        if isinstance(condition, str):
            return bool(self.delegate(condition))

        return bool(condition(self))
