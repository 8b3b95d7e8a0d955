"""
Services module - storage access, the application workflow, the feed
cache and the pass-through proxies (AI, image upload).
"""
