from mockery.protocols.behavior import Behavior, ExecutionSource

__all__ = ["Behavior", "ExecutionSource"]
