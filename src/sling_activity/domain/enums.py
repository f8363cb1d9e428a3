from enum import Enum

class TransactionType(Enum):
    """What kind of money movement an activity row represents"""
    CARD_PAYMENT = "cardPayment"
    P2P_SENT = "p2pSent"
    P2P_RECEIVED = "p2pReceived"
    ADD_MONEY = "addMoney"
    WITHDRAWAL = "withdrawal"
    TRANSFER_BETWEEN_ACCOUNTS = "transferBetweenAccounts"
    STOCK_BUY = "stockBuy"
    STOCK_SELL = "stockSell"
    OTHER = "other"


class SavingsMovement(Enum):
    """Direction of money relative to the savings pot"""
    DEPOSIT = "deposit" # into savings
    WITHDRAWAL = "withdrawal" # out of savings
