"""
Simulation core: tree model, execution steps, traversal generators, state
manager and execution engine.

Submodules are imported explicitly (``treewalk.core.engine`` etc.) so that
the settings module can depend on the leaf modules without import cycles.
"""
