"""Adapters — Discord intake, webhook delivery and the HTTP surface."""
