class NodeStateError(RuntimeError):
    """Raised when a node operation is called out of the harness call order."""
