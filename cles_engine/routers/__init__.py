"""
HTTP routers for the CLES engine
"""
