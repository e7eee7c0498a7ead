"""core/ -- Kernel shared by every other package (configuration).

Layer rule: core/ imports no project package.
"""
