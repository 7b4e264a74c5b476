"""
Site fine-tuning pipeline: configuration, page scraping and content extraction.
"""
