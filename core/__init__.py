"""
PaperRoost core.

Ambient services shared by every feature: layered configuration, the SQLite
audit logger, the key-value blob store, at-rest encryption and the runtime
context that wires the features together.
"""
