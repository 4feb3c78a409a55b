"""
Pagen - lazily generated character web pages.

A caller submits a character description and a page title, gets back an id,
and the first request for /gen/{id} asks the language model for a complete
HTML page, streams it back and stores it. Every later request is served from
the database.
"""
