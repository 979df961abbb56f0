"""Wire-level helpers: envelope codec and fragment reassembly."""
