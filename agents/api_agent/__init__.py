'''
Market data fetching for the voice stock assistant.

Folder structure under `agents/api_agent/` :

```
agents/api_agent/
├── config.py    SerpAPI key, endpoint and HTTP settings
├── models.py    SearchResult and the four-category StockDataBundle
└── client.py    SerpAPIClient and fetch_stock_data
```

'''
