"""
Product resource: `/productos` routes, validation rules and SQL.
"""
