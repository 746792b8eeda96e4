"""Domain initialization and configuration.

A single Protean domain hosts every aggregate (User, Book, Cart, Order) so that
checkout can change a Cart and create an Order inside one Unit of Work.
"""

from protean.domain import Domain

from bookstore.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
bookstore = Domain(name="bookstore")
