"""Parsing of the syntax descriptors of registered custom properties, aligned with the [CSS Properties and Values API](http://drafts.css-houdini.org/css-properties-values-api-1) specification.

See `cssprops.properties` for the parsing procedures, and `cssprops.values` for what they return.
"""
