"""Domain modules: accounts, wallets, withdrawals, bookings and platform settings."""
