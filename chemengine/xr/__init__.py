"""XR subpackage; it holds no modules yet."""