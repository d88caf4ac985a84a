"""
Helpers shared by the browser specs.

Every module in this package is imported by `browserspec.runner.load_support()`
and registered as a pytest plugin, so fixtures defined here are available to
all specs.
"""
