"""
User resource: `/usuarios` routes, validation rules and SQL.
"""
