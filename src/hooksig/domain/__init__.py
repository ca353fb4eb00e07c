"""Domain layer — type descriptors, hook signatures, syntax nodes, doc blocks.

This layer depends only on the stdlib.
It must never import from services, infrastructure, plugins, commands, or config.
"""
