"""Flask front end for the amortization engine."""
