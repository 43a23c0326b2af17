"""
API Package Initialization

HTTP transport for the Atom Mail Assistant background coordinator.
"""
