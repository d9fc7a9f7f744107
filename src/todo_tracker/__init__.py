"""Single-user task tracker: file-backed task store, service layer and a console front-end."""
