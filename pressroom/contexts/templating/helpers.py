"""
Template helpers registered as Jinja2 filters on every environment.
"""

from typing import Callable, Dict

from pressroom.contexts.content.markdown import slugify
from pressroom.utils.timestamp import format_timestamp

TEMPLATE_FILTERS: Dict[str, Callable] = {
    # {{ modified_time | timestamp("%B %d, %Y") }} or {{ date | timestamp(relative=True) }}
    "timestamp": format_timestamp,
    # {{ title | slugify }} matches the id given to a heading with the same text
    "slugify": slugify,
}
