"""
Infrastructure Package
======================

Wires the domain services together.

Modules:
    - container: builds the service graph once at startup and hands it to the views
"""
