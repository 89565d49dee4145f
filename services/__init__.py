"""
服務層

這個 package 包含驗證與查詢邏輯，不負責交易邊界：
- EligibilityService：年齡、性別、容量檢查
- ReportService：賽程、名單、成績查詢
- SeedService：範例資料
"""
