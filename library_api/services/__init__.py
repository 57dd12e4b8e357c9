"""
Services Package

Cross-cutting services used by the routers and the application factory.

Current services:
- rate_limiter.py: Rate limiting with slowapi
"""
