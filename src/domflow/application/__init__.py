"""
Application layer: configuration, errors, analysis context and pipeline.
"""
