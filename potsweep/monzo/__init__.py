"""Monzo API access: the token-refreshing sync wrapper and its asyncio adapter."""
