"""Stat selection and regrouping core."""
