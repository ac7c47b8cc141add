"""Month-grouped gallery grid model and controller."""