"""
Core services shared by the catalog modules.
"""
