"""Storefront customer identity service."""
