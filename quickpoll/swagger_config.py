def swagger_template(app=None):
    title = "Quick Poll API"
    version = "1.0.0"

    if app:
        title = app.config.get("SWAGGER_TITLE", title)
        version = app.config.get("SWAGGER_VERSION", version)

    return {
        "swagger": "2.0",
        "info": {
            "title": title,
            "version": version,
            "description": "Questions, their options, and votes. Deletion is refused while votes exist.",
        },
        "definitions": {
            "Option": {
                "type": "object",
                "properties": {
                    "id": {"type": "string", "format": "uuid"},
                    "text": {"type": "string"},
                    "votes": {"type": "integer", "minimum": 0},
                    "link_to_vote": {"type": "string"},
                }
            },
            "Question": {
                "type": "object",
                "properties": {
                    "id": {"type": "string", "format": "uuid"},
                    "title": {"type": "string"},
                    "options": {"type": "array", "items": {"$ref": "#/definitions/Option"}},
                }
            },
            "ErrorResponse": {
                "type": "object",
                "properties": {
                    "success": {"type": "boolean", "example": False},
                    "error": {
                        "type": "object",
                        "properties": {
                            "code": {"type": "string", "example": "FORBIDDEN"},
                            "message": {"type": "string", "example": "Option has votes and cannot be deleted."},
                            "details": {"type": "object"}
                        }
                    },
                    "request_id": {"type": "string"}
                }
            }
        }
    }
