"""forma command line tool."""
