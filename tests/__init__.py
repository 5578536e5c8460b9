"""
Movie Topics - Test Suite

Test modules organized by functionality:
- unit/preprocessing/ - Loader and tokenizer tests
- unit/topic_modeling/ - DTM, LDA, metrics, selector, summarizer, pipeline tests
- unit/ - Config, parallel processor and CLI tests
"""
