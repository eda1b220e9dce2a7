"""
API 層

- pages：HTTP 頁面與狀態查詢
- websocket：老師與學生共用的 WebSocket gateway
"""
