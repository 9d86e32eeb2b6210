"""Global search engine and catalogue instances to avoid circular imports."""

from .catalog import ProductCatalog
from .config import get_settings
from .core.engine import SearchEngine

# Global instances shared by the routers
settings = get_settings()
search_engine = SearchEngine.from_settings(settings)
catalog = ProductCatalog(
    search_engine,
    max_suggestions=settings.max_suggestions,
    suggestion_result_limit=settings.suggestion_result_limit
)
