# Shared helpers for the CodeMart backend
