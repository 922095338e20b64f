"""
Illustrative images: Cloudinary uploads keyed by category.
"""
