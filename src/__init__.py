"""Local Help Scraper - paginated directory crawler.

Walks the result pages of a "find local help" directory in a browser and
turns each listed agent, broker or assister into a structured contact
record.
"""

__version__ = "0.1.0"
__author__ = "Local Help Scraper Team"
