"""
Analyses over control flow graphs.
"""
