"""
Boundary layer: database access and outbound HTTP clients.
"""
