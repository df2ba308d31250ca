"""
ddcompute - Resource Domains

Each module defines the wire models for one kind of resource and a mixin of
operations that is composed into ``ComputeClient``.
"""
