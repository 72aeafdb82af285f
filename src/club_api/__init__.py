"""Members, sports and subscriptions backend for a sports club."""
