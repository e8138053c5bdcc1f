"""
Pre-authorization key issuance endpoint.
"""
