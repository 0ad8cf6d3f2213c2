"""
Infrastructure layer: payment, email, storage and event adapters behind
interfaces, resolved through ``infrastructure.container``.
"""
