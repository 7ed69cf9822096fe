"""
Cart Error Constants

User-facing notification texts and the internal exceptions raised by the
collaborator client and the cart storage.
"""

# Notification texts (shown verbatim to the shopper)
ERROR_OUT_OF_STOCK = "Quantidade solicitada fora de estoque"
ERROR_ADD_PRODUCT = "Erro na adição do produto"
ERROR_REMOVE_PRODUCT = "Erro na remoção do produto"
ERROR_UPDATE_AMOUNT = "Erro na alteração de quantidade do produto"


class CollaboratorError(Exception):
    """Stock or product lookup failed (network, HTTP status, bad payload)."""


class StorageError(Exception):
    """Cart snapshot could not be written to the key-value store."""
