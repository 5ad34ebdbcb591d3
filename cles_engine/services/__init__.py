"""
Service layer for the CLES engine
"""
