"""
A tree-walking interpreter for a small dynamically-typed scripting language
with closures, first-class functions, and single-inheritance classes.
"""
