# Data-access classes used by the routers; the book repository owns all book SQL.
