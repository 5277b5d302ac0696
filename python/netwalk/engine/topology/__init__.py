from netwalk.engine.topology.topology import Topology

__all__ = ["Topology"]
