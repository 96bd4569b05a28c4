"""Clients for services the catalog cache depends on."""
