"""Watch the X11 CLIPBOARD selection and report each new owner's content."""
