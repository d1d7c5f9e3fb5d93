"""Domain handles for wallets, transactions, contracts and monitors.

Import handles from their modules; the client builds them through its
factories (``Waas.wallet()``, ``Waas.eth()``, ``Waas.btc()``).
"""
