"""
Purchases App - Player trades

Currency arithmetic for gold/silver/copper coins and the settlement of
single-item buys and sells between a player session and a shop.

Architecture:
- currency: Currency value type and pure coin arithmetic
- models: CurrencyHolder abstract model (shop tills, player wallets)
- services: PurchaseSettlementService, buy_for_session, sell_for_session
- views: buy / sell / stock endpoints
"""
