"""以 UniStore 實作的 todo 清單範例應用。"""
