"""
Expenses App - Shared Team Expenses

Tracks what players on a team paid for each other and works out who owes
whom.

Key Features:
- Equal, weighted (games played) and custom splits
- Net balance per player
- Greedy settlement plan with few payments
- Settlement payments recorded as expenses

Architecture:
- Models: Team, Player, ExpenseTag, Expense
- Services: pure engine (validation, split_calculation, balance_aggregation,
  settlement_planning, share_editing) plus the ORM-facing ledger module
- Views: RESTful API with ViewSets
"""
