"""
Adapters layer (CLI, settings)
"""
