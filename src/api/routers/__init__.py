# Route modules for the library API: health and book CRUD.
