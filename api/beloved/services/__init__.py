"""
Domain services shared by the API routers and the webhook
"""
