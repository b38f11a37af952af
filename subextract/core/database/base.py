# File: subextract/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. Metadata store models inherit from this.
Base = declarative_base()
