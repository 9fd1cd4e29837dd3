"""avaxapi command line interface."""
