"""Core domain modules.

- market_data: Bybit kline client and upstream error types
- indicators: Parkinson volatility estimator and rolling transform
- analysis: fetch -> window -> estimate pipeline
- config: environment-driven settings
- types: candle and volatility point records
"""
