"""
AI Module - everything that talks to the language model.

Layout:
    providers/   Provider clients behind one streaming interface
    gateway.py   Short model name -> provider endpoint, the single entry point
    prompts/     System prompt and the submission prompt templates
    monitoring/  Structured logging of generation runs

Flow for one page:
    ModelGateway.generate(model, prompt)
        -> resolve model name to an endpoint (fails before any chunk)
        -> provider.stream(...) yields text chunks in order
"""
