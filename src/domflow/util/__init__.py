"""
Utility modules for the domflow analysis tool.

This package provides the supporting utilities used throughout domflow:
- Application-level utilities such as the phase console (application/)
- I/O and formatting utilities (io/)
- Graph algorithms (graphalgorithim/)
"""
