"""
Validation Rules

Rules are attached to params definitions, either from the `output`
configuration of an element or from params patches:

    @OrderForm.params
    def order_rules(patch):
        patch.validates('email', presence=True, format=r'@', if_='email_required')
        patch.nested('items').validates('quantity', numericality=dict(greater_than=0))

A condition (`if_` / `unless`) is a callable, called with no argument or
with the params object, or the name of a predicate resolved through the
owner chain of the params object.
"""
import inspect
import re

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from forma.error import DefinitionError
from forma.helper import humanize

from ._meta import config
from .element import format_value

NESTED_ATTRIBUTES_SUFFIX = config.NESTED_ATTRIBUTES_SUFFIX


def is_blank(value):
    if value is None:
        return True

    if isinstance(value, str):
        return not value.strip()

    if isinstance(value, (list, tuple, set, dict)):
        return not value

    return False


def _evaluate(condition, params):
    if isinstance(condition, str):
        return params.delegate(condition)

    try:
        arity = len(inspect.signature(condition).parameters)
    except (TypeError, ValueError):
        arity = 1

    return condition() if arity == 0 else condition(params)


def _pluralize(count, word):
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class Rule(object):
    OPTIONS = ()
    REQUIRED = None

    def __init__(self, option=True, if_=None, unless=None):
        self.option = option
        self.if_ = if_
        self.unless = unless

    def applies(self, params):
        if self.if_ is not None and not _evaluate(self.if_, params):
            return False

        if self.unless is not None and _evaluate(self.unless, params):
            return False

        return True

    def check(self, params, name):
        if not self.applies(params):
            return ()

        return tuple((name, message) for message in self.messages(params.lookup(name), params, name))

    def messages(self, value, params, name):
        raise NotImplementedError


class PresenceRule(Rule):
    def messages(self, value, params, name):
        if self.option and is_blank(value):
            yield "can't be blank"


class InclusionRule(Rule):
    OPTIONS = ('in',)
    REQUIRED = 'in'

    def messages(self, value, params, name):
        choices = self.option['in'] if isinstance(self.option, Mapping) else self.option
        if value is not None and value not in choices:
            yield "is not included in the list"


class NumericalityRule(Rule):
    COMPARISONS = (
        ('greater_than', lambda value, limit: value > limit, "must be greater than {}"),
        ('greater_than_or_equal_to', lambda value, limit: value >= limit, "must be greater than or equal to {}"),
        ('equal_to', lambda value, limit: value == limit, "must be equal to {}"),
        ('less_than', lambda value, limit: value < limit, "must be less than {}"),
        ('less_than_or_equal_to', lambda value, limit: value <= limit, "must be less than or equal to {}"),
        ('other_than', lambda value, limit: value != limit, "must be other than {}"),
    )
    OPTIONS = tuple(key for key, _, _ in COMPARISONS) + ('only_integer', 'odd', 'even')

    def messages(self, value, params, name):
        if value is None or value == '' or not self.option:
            return

        number = self.to_number(value)
        if number is None:
            yield "is not a number"
            return

        options = self.option if isinstance(self.option, Mapping) else {}
        if options.get('only_integer') and number != number.to_integral_value():
            yield "must be an integer"
            return

        for key, compare, message in self.COMPARISONS:
            if key in options and not compare(number, Decimal(str(options[key]))):
                yield message.format(options[key])

        if options.get('odd') and number % 2 != 1:
            yield "must be odd"

        if options.get('even') and number % 2 != 0:
            yield "must be even"

    @staticmethod
    def to_number(value):
        if isinstance(value, bool):
            return None

        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            return None

        # NaN and infinities cannot be compared or reduced modulo
        return number if number.is_finite() else None


class LengthRule(Rule):
    OPTIONS = ('is', 'minimum', 'maximum', 'in')

    def messages(self, value, params, name):
        if value is None:
            return

        options = dict(self.option) if isinstance(self.option, Mapping) else {}
        if 'in' in options:
            options['minimum'], options['maximum'] = options.pop('in')

        size = len(value) if hasattr(value, '__len__') else len(format_value(value))
        if 'is' in options and size != options['is']:
            yield f"is the wrong length (should be {_pluralize(options['is'], 'character')})"
        if 'minimum' in options and size < options['minimum']:
            yield f"is too short (minimum is {_pluralize(options['minimum'], 'character')})"
        if 'maximum' in options and size > options['maximum']:
            yield f"is too long (maximum is {_pluralize(options['maximum'], 'character')})"


class FormatRule(Rule):
    OPTIONS = ('with',)
    REQUIRED = 'with'

    def __init__(self, option=True, if_=None, unless=None):
        pattern = option['with'] if isinstance(option, Mapping) else option
        super().__init__(re.compile(pattern), if_, unless)

    def messages(self, value, params, name):
        if value is not None and not self.option.search(str(value)):
            yield "is invalid"


class ConfirmationRule(Rule):
    def check(self, params, name):
        if not self.option or not self.applies(params):
            return ()

        key = f'{name}_confirmation'
        confirmation = params.lookup(key)
        if confirmation is None or confirmation == params.lookup(name):
            return ()

        return ((key, f"doesn't match {humanize(name)}"),)


RULE_TYPES = {
    'presence': PresenceRule,
    'inclusion': InclusionRule,
    'numericality': NumericalityRule,
    'length': LengthRule,
    'format': FormatRule,
    'confirmation': ConfirmationRule,
}

CONDITION_KEYS = ('if', 'if_', 'unless')


def build_rules(options, if_=None, unless=None):
    rules = []
    for key, option in options.items():
        if key in CONDITION_KEYS:
            continue

        if key not in RULE_TYPES:
            raise DefinitionError("F10.510", f"Unknown validation rule [{key}]")

        if option is None or option is False:
            continue

        rule_type = RULE_TYPES[key]
        rule_if, rule_unless = if_, unless
        if isinstance(option, Mapping):
            option = dict(option)
            rule_if = option.pop('if_', option.pop('if', rule_if))
            rule_unless = option.pop('unless', rule_unless)

            unknown = [name for name in option if name not in rule_type.OPTIONS]
            if unknown:
                raise DefinitionError(
                    "F10.512", f"Unknown options {unknown} for validation rule [{key}]"
                )

            if rule_type.REQUIRED and rule_type.REQUIRED not in option:
                raise DefinitionError(
                    "F10.513", f"Validation rule [{key}] requires the [{rule_type.REQUIRED}] option"
                )

            option = option or True

        rules.append(rule_type(option, if_=rule_if, unless=rule_unless))

    return rules


def rules_for(output):
    ''' Rules declared by an element output configuration, in rule order. '''
    if output is None:
        return []

    return build_rules(
        {key: getattr(output, key) for key in RULE_TYPES},
        if_=output.if_,
        unless=output.unless,
    )


class ParamsPatch(object):
    ''' Extra rules for one level of a params definition. '''

    def __init__(self):
        self.rules = []
        self.children = {}

    def validates(self, name, **options):
        if_ = options.get('if_', options.get('if'))
        unless = options.get('unless')
        for rule in build_rules(options, if_=if_, unless=unless):
            self.rules.append((name, rule))
        return self

    def nested(self, name):
        if name.endswith(NESTED_ATTRIBUTES_SUFFIX):
            name = name[:-len(NESTED_ATTRIBUTES_SUFFIX)]

        if name not in self.children:
            self.children[name] = ParamsPatch()

        return self.children[name]
