"""Catalogue bounded context — products, categories, reviews and ratings.

Reviews live beside the products they rate because the product record
carries a denormalized rating aggregate derived from approved reviews.
"""

from protean.domain import Domain

from catalogue.utils.logging import configure_logging, get_logger

configure_logging(log_file_prefix="robotech")

logger = get_logger(__name__)

catalogue = Domain(name="catalogue")
