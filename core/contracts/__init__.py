"""core.contracts

Stable interfaces (ABCs) shared between features and platform adapters.

Features depend on these contracts, not on each other's concrete classes;
the composition root (``core.common.app_context``) wires implementations.
"""
