"""
Contracts feature.

The persisted contract list, its queries and the save workflow of the
contract form.
"""
