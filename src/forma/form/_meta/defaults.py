import os

# Index token of the template row of a subforms collection,
# replaced client-side with a fresh unique token.
NEW_RECORD_PLACEHOLDER = "NEW_RECORD"

# "declared" | "rendered"
DEFAULT_SCHEMA_POLICY = "declared"

NESTED_ATTRIBUTES_SUFFIX = "_attributes"
ERRORS_CSS_CLASS = "field-errors"
UTF8_ENFORCER_VALUE = "✓"
SUBMIT_INPUT_NAME = "commit"
AUTHENTICITY_TOKEN_NAME = "authenticity_token"
METHOD_OVERRIDE_NAME = "_method"

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")
