"""Sample forms and records used by the test suite and the command line examples."""
