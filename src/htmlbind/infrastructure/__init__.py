"""Infrastructure layer: HTML parsing and selector evaluation.

This layer depends on stdlib and BeautifulSoup (soupsieve for CSS selectors).
It may import domain types and errors, never binding or serializers.
"""
