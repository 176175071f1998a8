"""Board model, attack resolution and fleet rules."""
