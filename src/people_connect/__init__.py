"""People Connect - a personal contact and relationship manager."""
