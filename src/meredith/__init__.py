"""Meredith: multi-tenant web backend for page, shop and company modules."""
