"""
Services — the three stages of umbrella header generation.

    header_scan        directory → scanned include directives
    include_reconcile  static list + scanned list → drift report
    template_populate  template + static content → destination file
"""
