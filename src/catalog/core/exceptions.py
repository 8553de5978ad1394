"""Error taxonomy for the product catalog.

Every failure the catalog reports to a client is a ``CatalogError`` subclass
carrying the HTTP status and the message placed in the error body.
"""


class CatalogError(Exception):
    """Base class for errors surfaced as ``{success: false, error: ...}``."""

    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidCategory(CatalogError):
    """Referenced category is malformed or does not exist."""

    status_code = 400
    message = "Invalid Category"


class InvalidProductId(CatalogError):
    """Product identifier does not have the shape the store requires."""

    status_code = 400
    message = "Invalid Product Id"


class ProductNotFound(CatalogError):
    """No product with the given identifier."""

    status_code = 404
    message = "Product not found"


class InvalidProduct(ProductNotFound):
    """Target of an update does not exist."""

    status_code = 400
    message = "Invalid Product"


class MissingImage(CatalogError):
    """A create request arrived without its image file."""

    status_code = 400
    message = "No image in the request"


class UnsupportedImageType(CatalogError):
    """Uploaded file declares a content type outside the accepted set."""

    status_code = 400
    message = "Invalid image type"


class InvalidPayload(CatalogError):
    """Request form carries unknown fields, bad values or too many files."""

    status_code = 400
    message = "Invalid request payload"


class PersistenceFailure(CatalogError):
    """The store accepted the call but produced no record."""

    status_code = 500
    message = "The product cannot be saved"


class InternalFailure(CatalogError):
    """Unexpected store or runtime failure."""

    status_code = 500
    message = "Internal Server Error"


class CategoryNotFound(CatalogError):
    """No category with the given identifier."""

    status_code = 404
    message = "Category not found"
