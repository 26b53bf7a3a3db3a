class SectionCsvError(Exception):
    """Base exception for all sectioncsv errors."""
    pass

class UnsupportedExtensionError(SectionCsvError):
    pass

class UnreadableFileError(SectionCsvError):
    pass

class ConversionFailedError(SectionCsvError):
    pass

class OfferImportError(SectionCsvError):
    pass
