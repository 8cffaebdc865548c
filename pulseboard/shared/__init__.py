"""
PulseBoard Shared Kernel
========================

Architecture:
- core: EventBus, scheduling, configuration
- infrastructure: durable key-value storage
- domain: data shapes, seed data, derived values
"""
