"""
The tree-walking run-time: values, evaluation, and the overall control.
"""
