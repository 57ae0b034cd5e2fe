"""Marketing Agent - turns a public web page into a structured marketing strategy.

The page is reduced to a bounded text digest, embedded into a fixed prompt,
sent to an LLM, and the reply is normalized into a validated MarketingAnalysis.

Components:
- retrieval: page fetching and digest extraction
- llm: prompt assembly, generation client, response normalization
- pipeline: orchestration and error mapping
- rendering: plain-text report
- main_api: HTTP endpoint
"""
