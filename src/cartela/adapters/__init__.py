"""
Adapters Module

Contains:
- api: transporte HTTP e cliente autorizado do backend
- storage: implementações de KeyValueStore
- location: URL da página em memória
"""
