"""
Mock Device Server - Application Package Initializer
====================================================

What: Stub HTTP server that imitates a fiscal cash register and a POS terminal.
Who:  Client software under integration test; nothing here touches real hardware.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Response Generators)  │  ← validation, synthesis
    ├─────────────────────────────────────┤
    │         Schemas (Response shapes)   │  ← Pydantic, camelCase on the wire
    └─────────────────────────────────────┘

    There is no persistence layer. Every request is answered from its own
    body, the clock and a random source.
"""

__version__ = "1.0.0"
