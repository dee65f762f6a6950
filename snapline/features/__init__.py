"""
Features - vertical slices of the editor.

Each feature keeps its own domain, application and infrastructure layers.
"""
