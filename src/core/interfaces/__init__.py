"""Contratos (Protocol) de los colaboradores del publicador.

El Core depende de estos Protocols; issuer, storage, caché y resolvers
concretos viven en `adapters`.
"""
