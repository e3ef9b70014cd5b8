from app.utils.validators import is_int_in, is_number, is_string, missing_fields

PRODUCT_STATUSES = (1, 2)
PRODUCT_TYPES = (1, 2)
PRODUCT_FIELDS = ('name', 'status', 'type', 'description', 'price', 'image_id', 'video_id')

def validate_product_input(data, partial=False):
    if not partial:
        missing = missing_fields(data, ('name', 'type', 'price'))
        if missing:
            return False, f"Missing required fields: {', '.join(missing)}"

    if 'name' in data and not is_string(data['name'], 2, 100):
        return False, "Name must be between 2 and 100 characters long"

    if data.get('status') is not None and not is_int_in(data['status'], PRODUCT_STATUSES):
        return False, "status must be 1 or 2"

    if 'type' in data and not is_int_in(data['type'], PRODUCT_TYPES):
        return False, "type must be 1 or 2"

    if data.get('description') is not None and not is_string(data['description'], 0, 1000):
        return False, "Description must not exceed 1000 characters"

    if 'price' in data and (not is_number(data['price']) or data['price'] < 0):
        return False, "price must be a non-negative number"

    image_ids = data.get('image_id')
    if image_ids is not None and (
        not isinstance(image_ids, list) or not all(isinstance(i, str) for i in image_ids)
    ):
        return False, "image_id must be a list of file ids"

    return True, None
